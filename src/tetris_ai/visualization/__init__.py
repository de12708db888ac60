"""pygame front end: snapshot renderer and keyboard-driven play loop."""
