"""Domain services producing the fuel-price views."""
