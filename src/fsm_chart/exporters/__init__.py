"""Export chart graphs as DOT, JSON or networkx graphs."""
