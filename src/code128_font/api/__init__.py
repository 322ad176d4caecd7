"""HTTP API for the Code 128 font encoder."""
