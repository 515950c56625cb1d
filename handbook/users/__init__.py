"""Users, friendships and notifications."""
