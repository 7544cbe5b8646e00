"""The CONTROLLER layer drives the view from a motion source every tick."""
