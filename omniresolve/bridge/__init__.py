"""Bridge layer between omniresolve and the Artifactory REST API.

Modules
-------
http
    ``ArtifactoryClient`` wraps a ``requests.Session`` behind the small
    ``RequestExecutor`` protocol the resolver depends on, so tests can
    substitute a fake executor.
"""
