"""Application layer: requests, handlers and the mediator dispatching them."""
