"""HTTP adapter exposing Hex Wizards games."""
