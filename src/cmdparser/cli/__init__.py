"""CLI layer — command tree, output sink, and the process error boundary.

This package is the outermost layer.  It may import from ``core`` and
``infra``, but no other layer may import from ``cli``.
"""
