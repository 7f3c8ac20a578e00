"""kbgraph CLI subcommands."""
