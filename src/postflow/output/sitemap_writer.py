"""sitemap.xml output writer."""

from datetime import datetime, timezone
from pathlib import Path
from xml.etree import ElementTree

import aiofiles

from postflow.models.sitemap import UrlEntry

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def format_lastmod(value: datetime) -> str:
    """W3C datetime for <lastmod>. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def render_sitemap_xml(entries: list[UrlEntry]) -> str:
    """Render entries as a sitemaps.org <urlset> document."""
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)

    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = entry.url
        ElementTree.SubElement(url, "lastmod").text = format_lastmod(entry.last_modified)
        ElementTree.SubElement(url, "changefreq").text = entry.change_frequency.value
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"

    ElementTree.indent(urlset)
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


class SitemapWriter:
    """Writer for sitemap.xml files."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    async def write(self, entries: list[UrlEntry], filename: str = "sitemap.xml") -> Path:
        """Write entries to ``output_dir/filename``."""
        file_path = self.output_dir / filename

        async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
            await f.write(render_sitemap_xml(entries))

        return file_path


def create_sitemap_writer(output_dir: Path) -> SitemapWriter:
    """Factory function to create a sitemap writer."""
    return SitemapWriter(output_dir=output_dir)
