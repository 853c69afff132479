"""Connection supervision, intent classification and response assembly."""
