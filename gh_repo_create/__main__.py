"""Allow ``python -m gh_repo_create``."""

from gh_repo_create.cli import main

if __name__ == "__main__":
    main()
