"""Protocol-level building blocks for the H3C supplicant."""
