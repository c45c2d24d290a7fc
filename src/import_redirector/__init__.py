"""Import path redirector: go-import meta tags and docs redirects for custom domains."""

__version__ = "0.1.0"
