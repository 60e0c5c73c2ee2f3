"""CMake language server backed by cmake's built-in help."""
