from __future__ import annotations


class HistPDFError(Exception):
    """Base class for histpdf errors."""

    pass


class PDFConstructionError(HistPDFError):
    """Fatal error thrown when a :class:`~histpdf.pdf.PDF` cannot be built.

    No partially constructed PDF is ever handed back to the caller.

    Attributes
    ----------
    pdf_name: str
        name of the PDF being constructed. Appended to the error message if
        set.
    """

    def __init__(self, *args, pdf_name: str = None) -> None:
        super().__init__(*args)
        self.pdf_name = pdf_name

    def __str__(self) -> str:
        suffix = ""
        if self.pdf_name:
            suffix += "\nThrown while constructing PDF " + self.pdf_name
        return super().__str__() + suffix
