"""Decision directory and document commands."""
