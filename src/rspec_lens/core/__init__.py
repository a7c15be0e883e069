"""Core analysis: syntax walking, naming, command building and lens emission."""
