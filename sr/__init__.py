"""Command line tools for Struct_Replay."""
