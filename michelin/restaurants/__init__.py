"""
Restaurant query engine.

Responsibilities:
- Hold the loaded restaurant dataset behind an atomically swappable snapshot.
- Interpret a path parameter as either a numeric id or a restaurant name.
- Match cuisine and location tags word by word, case-insensitively.
- Page through the full listing.
"""
