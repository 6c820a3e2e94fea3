"""HTML templates for the inventory report.

Placeholders use str.format syntax; every substituted value is escaped by the
caller, so literal CSS braces are doubled.
"""

HTML_HEADER = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Template Inventory - {root}</title>
<style>
body {{ font-family: Arial, sans-serif; margin: 20px; color: #222; }}
h1 {{ color: #1f3a5f; }}
h2 {{ color: #1f3a5f; border-bottom: 2px solid #1f3a5f; padding-bottom: 4px; }}
table {{ border-collapse: collapse; width: 100%; margin-bottom: 24px; }}
th {{ background: #1f3a5f; color: #fff; text-align: left; }}
th, td {{ border: 1px solid #ccc; padding: 6px; vertical-align: top; }}
tr:nth-child(even) {{ background: #f4f6f8; }}
code {{ white-space: pre-wrap; }}
</style>
</head>
<body>
<h1>Template Inventory</h1>
<p><strong>Application root:</strong> {root}<br>
<strong>Analysis date:</strong> {scan_date}<br>
<strong>Generated by:</strong> cfinventory {tool_version}</p>
"""

HTML_SUMMARY = """<h2>Executive Summary</h2>
<table>
<tr><th>Element</th><th>Count</th></tr>
<tr><td>Files</td><td>{files}</td></tr>
<tr><td>Queries</td><td>{queries}</td></tr>
<tr><td>Functions</td><td>{functions}</td></tr>
<tr><td>Components</td><td>{components}</td></tr>
<tr><td>Invokes</td><td>{invokes}</td></tr>
<tr><td>Includes</td><td>{includes}</td></tr>
<tr><td>Modules</td><td>{modules}</td></tr>
</table>
<table>
<tr><th>Extension</th><th>Files</th><th>Share</th></tr>
{extension_rows}
</table>
"""

EXTENSION_ROW = "<tr><td>{extension}</td><td>{count}</td><td>{percentage}</td></tr>"

HTML_SECTION = """<h2>{title}</h2>
<table>
<tr>{header_cells}</tr>
{rows}
</table>
"""

HTML_EMPTY_ROW = '<tr><td colspan="{span}">None found</td></tr>'

HTML_FOOTER = """</body>
</html>
"""
