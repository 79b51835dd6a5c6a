"""Development entrypoint for the Hex Wizards tools."""

from __future__ import annotations

from hexwizards.main import main

if __name__ == "__main__":
    main()
