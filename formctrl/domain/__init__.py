"""Control and collection model for formctrl."""
