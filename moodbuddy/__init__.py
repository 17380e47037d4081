"""Moodbuddy - daily mood journaling backend."""
