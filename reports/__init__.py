"""운세 결과 내보내기"""
from .generator import ReportGenerator, ShareNotConfigured
from .pdf_generator import PDFGenerator, generate_pdf_report

__all__ = ['ReportGenerator', 'ShareNotConfigured', 'PDFGenerator', 'generate_pdf_report']
