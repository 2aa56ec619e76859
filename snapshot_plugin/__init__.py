"""pytest integration for predicate-aware snapshot assertions."""
