"""WebSocket front end serving one single-player game per connection."""
