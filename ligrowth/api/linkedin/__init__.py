"""LinkedIn proxy resources.

Usage
-----
Import resources for route registration::

    from ligrowth.api.linkedin.resources import ChangelogResource
"""
