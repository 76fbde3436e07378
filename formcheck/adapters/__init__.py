"""
UI collaborator adapters.

- MemoryForm: In-memory ValueSource/ErrorPresenter for headless use and tests
"""

from formcheck.adapters.memory import MemoryElement, MemoryForm

__all__ = ['MemoryElement', 'MemoryForm']
