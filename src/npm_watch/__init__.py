"""npm-watch core package.

Detects dist-tag changes on npm packages and enriches them with GitHub
release notes. The checking logic is callable from the bundled CLI or from
any scheduler that can hold on to a last-seen mapping between runs.
"""

__all__ = [
    "core",
]
