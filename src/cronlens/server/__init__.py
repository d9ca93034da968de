"""HTTP server exposing the chat command endpoint."""
