"""Step definer modules used by the discovery tests."""
