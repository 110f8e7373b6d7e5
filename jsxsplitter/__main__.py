"""Entry point for running jsxsplitter as a module."""

from jsxsplitter.cli_entry import main

if __name__ == "__main__":
    main()
