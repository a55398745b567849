"""Terminal front end for the contact book. Run with python -m cli."""
