"""Front-ends that feed key events into an editor session."""
