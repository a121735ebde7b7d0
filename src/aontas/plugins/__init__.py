from aontas.plugins.renderers import docx_renderer, pdf_renderer, txt_renderer  # noqa: F401
