"""Building blocks for managing versions of OpenTofu, Terraform, Terragrunt and Atmos."""

__version__ = "4.0.0"