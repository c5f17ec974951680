"""JSON web API for the scheduling simulator.

This package provides a Flask application that exposes ``simulate`` and
``compare`` over HTTP.  It is an **optional** extra, installed with::

    pip install py-sched[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /api/policies`` — the policy identifiers and default quantum.
- ``POST /api/simulate`` — run one policy and return the full result.
- ``POST /api/compare`` — run every policy and return their metrics.
"""
