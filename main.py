from __future__ import annotations

from pathraster.cli import main


if __name__ == "__main__":
    main()
