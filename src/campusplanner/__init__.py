"""Campus planner: class scheduling and capacity balancing for student groups."""

__version__ = "0.1.0"
