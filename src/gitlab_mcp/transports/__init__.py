"""Transport shells (stdio, streamable HTTP) around the core tool surface."""
