import base64
import logging

from playwright.async_api import Error as PlaywrightError

from .browser import NAVIGATION_TIMEOUT_MS, launch_browser
from .errors import RenderError
from .models import PdfJob, PdfResult

logger = logging.getLogger(__name__)

PDF_FORMAT = "A4"
PDF_MARGINS = {"top": "20mm", "right": "15mm", "bottom": "20mm", "left": "15mm"}

HEADER_TEMPLATE = "<div></div>"
FOOTER_TEMPLATE = (
    '<div style="width:100%;font-size:9px;padding:5px 15px;color:#999;text-align:center;">'
    '<span>Page <span class="pageNumber"></span> of <span class="totalPages"></span></span>'
    "</div>"
)


async def render_pdf(job: PdfJob) -> PdfResult:
    """
    Render `job.html` to a paginated A4 PDF with a "Page X of Y" footer.

    The markup is loaded directly into the page (no navigation) and rendering
    waits for network idle so linked stylesheets and images make it in.
    Raises RenderError on any browser failure.
    """
    try:
        async with launch_browser() as browser:
            page = await browser.new_page()
            await page.set_content(job.html, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)
            pdf_bytes = await page.pdf(
                format=PDF_FORMAT,
                print_background=True,
                margin=PDF_MARGINS,
                display_header_footer=True,
                header_template=HEADER_TEMPLATE,
                footer_template=FOOTER_TEMPLATE,
            )
    except PlaywrightError as exc:
        raise RenderError(f"PDF rendering failed: {exc}") from exc

    logger.info("Rendered %s (%d bytes)", job.file_name, len(pdf_bytes))
    return PdfResult(
        pdf=base64.b64encode(pdf_bytes).decode("ascii"),
        file_name=job.file_name,
    )
