"""Domain models and errors.

Pure data structures (Pydantic v2, dataclasses) and the error taxonomy.
The domain knows nothing about subprocesses, HTTP clients or the CLI.
"""
