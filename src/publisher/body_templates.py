"""Confluence storage-format bodies for folder pages and document pages."""

from xml.sax.saxutils import quoteattr

CONTAINER_TEMPLATE = """
<ac:structured-macro ac:name="pagetree">
  <ac:parameter ac:name="reverse">false</ac:parameter>
  <ac:parameter ac:name="sort">position</ac:parameter>
  <ac:parameter ac:name="root">
    <ac:link>
      <ri:page ri:content-title={title}/>
    </ac:link>
  </ac:parameter>
  <ac:parameter ac:name="startDepth">2</ac:parameter>
  <ac:parameter ac:name="excerpt">false</ac:parameter>
  <ac:parameter ac:name="searchBox">true</ac:parameter>
  <ac:parameter ac:name="expandCollapseAll">true</ac:parameter>
</ac:structured-macro>"""

CONTENT_TEMPLATE = """
<ac:structured-macro ac:name="markdown">
  <ac:plain-text-body>
    <![CDATA[
{content}
]]>
  </ac:plain-text-body>
</ac:structured-macro>"""


def container_body(title: str) -> str:
    """Page tree macro listing the children of the page titled ``title``."""
    return CONTAINER_TEMPLATE.format(title=quoteattr(title))


def content_body(content: str) -> str:
    """Wrap rendered content verbatim in a markdown macro.

    A ``]]>`` inside the content would close the CDATA section early, so it
    is split across two sections.
    """
    return CONTENT_TEMPLATE.format(
        content=content.replace(']]>', ']]]]><![CDATA[>')
    )
