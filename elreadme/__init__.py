"""Generate Markdown READMEs from annotated Emacs Lisp sources."""

__version__ = "0.3.0"
