"""updo - keep a markdown TODO list sorted, one day at a time."""
