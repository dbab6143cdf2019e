"""Infrastructure layer.

Concrete resilience components, network probing, HTTP, config, logging and CLI display.
"""
