from html2uitk.model.diagnostic import Diagnostic, Severity

__all__ = ["Diagnostic", "Severity"]
