"""HTTP and WebSocket front end for the rules engine."""
