"""Message stylers."""
