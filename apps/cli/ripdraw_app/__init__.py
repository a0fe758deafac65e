"""Command line front end for the ripdraw renderer."""
