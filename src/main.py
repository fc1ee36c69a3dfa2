"""Entry point for the MemoAnimalia console game."""
from memo.console import main

if __name__ == "__main__":
    main()
