"""
HTTP layer.  ``router`` exposes every route under a single router that
``main.create_app`` mounts at ``/api``.
"""
