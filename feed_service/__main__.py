"""Module entry point: ``python -m feed_service`` runs the CLI."""

from feed_service.cli.main import main

if __name__ == "__main__":
    main()
