from .reportlab_renderer import ReportLabDocumentRenderer

__all__ = ["ReportLabDocumentRenderer"]
