"""Launch the number match game window."""

from number_match.ui.main import run

if __name__ == "__main__":
    run()
