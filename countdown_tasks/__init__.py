"""Countdown Tasks: deadline-driven personal task tracker."""
