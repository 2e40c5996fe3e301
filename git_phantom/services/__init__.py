"""Services for git-phantom."""
