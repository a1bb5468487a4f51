"""Allow running with ``python -m client_secret_expiration``."""

from .main import main

main()
