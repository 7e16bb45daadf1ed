"""twapi command line interface."""
