"""Stop route planner: nearest-neighbour and 2-opt ordering of geographic stops."""
