"""Mirror build-tool dependency reports into Ardoq."""
