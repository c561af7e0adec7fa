"""Card data model and the effect text DSL."""
