"""
Sync subsystem.

Components:
- reconcile.py: merges incoming records into the local list (ids as join key)
- transform.py: converts GitLab feed items into todo records
- ports.py: the feed source interface the pipeline depends on
- pipeline.py: one full run (fetch, transform, load, reconcile, persist)
"""
