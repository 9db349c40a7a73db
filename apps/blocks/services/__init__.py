"""Service layer for block placement and visibility."""
