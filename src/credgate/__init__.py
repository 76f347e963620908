"""credgate - account registration and session-gated access."""
