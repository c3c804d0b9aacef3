"""htmx-starter: scaffold an HTMX project for Rust, Go or TypeScript."""

__version__ = "0.0.1"
