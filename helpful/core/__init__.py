"""Error value, conversions, ad-hoc construction and process termination."""
