"""Domain events emitted by the retry executor and the health prober."""
