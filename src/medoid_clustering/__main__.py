"""Allow `python -m medoid_clustering` to execute the CLI."""

from medoid_clustering.main import main


def run() -> None:
    """Delegate to the existing CLI entry point."""
    main()


if __name__ == "__main__":
    run()
