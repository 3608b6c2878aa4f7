"""Directory-backed persistence of JSON payloads.

Layout of one database:
    <root>/                          canonical absolute directory, named by the database
    ├── .metadata/
    │   └── metadata.json            {"name", "created", "modified"}
    └── <relative/path>.json         collection files; parents created on first write
"""
