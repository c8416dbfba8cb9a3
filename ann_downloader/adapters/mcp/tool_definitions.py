"""
MCP Tool Definitions

Single source of truth for tool schemas and descriptions.
Used by the stdio server and the CLI's list-tools command.
"""

_FILTER_PROPERTIES = {
    "symbols": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Stock codes, pinyin abbreviations or short names (e.g. 000001, PAYH, 平安银行)"
    },
    "years": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Fiscal years to keep (e.g. [\"2022\"]). Omit to keep the most recent years found."
    },
    "recent_years": {
        "type": "integer",
        "description": "How many of the most recent years to keep when years is omitted",
        "default": 3
    },
    "all_years": {
        "type": "boolean",
        "description": "Keep every year (no year filter)",
        "default": False
    },
    "match": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Keep only titles containing one of these keywords"
    },
    "exclude": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Drop titles containing any of these keywords (default: [\"摘要\"])"
    },
    "category": {
        "type": "string",
        "description": "annual, semiannual, q1, q3 or a raw cninfo category selector (default: annual)"
    },
}

# Tool schemas for MCP
TOOL_SCHEMAS = {
    "download_announcements": {
        "name": "download_announcements",
        "description": """Download cninfo announcement PDFs to <dir>/<code>.<name>/<title>.pdf. Existing files are skipped.

download_announcements(["000001"], years=["2022"]) → {downloaded: 1, skipped: 0, companies: [...]}
""",
        "inputSchema": {
            "type": "object",
            "properties": {
                **_FILTER_PROPERTIES,
                "no_skip": {
                    "type": "boolean",
                    "description": "Re-download even if the file exists",
                    "default": False
                }
            },
            "required": ["symbols"]
        }
    },
    "list_announcements": {
        "name": "list_announcements",
        "description": """List the announcements a download would select, without downloading.

list_announcements(["平安银行"]) → titles, URLs, destination paths, already-downloaded flags
""",
        "inputSchema": {
            "type": "object",
            "properties": dict(_FILTER_PROPERTIES),
            "required": ["symbols"]
        }
    },
    "list_downloaded": {
        "name": "list_downloaded",
        "description": """List announcement PDFs already downloaded, with disk usage.""",
        "inputSchema": {
            "type": "object",
            "properties": {
                "code": {
                    "type": "string",
                    "description": "Optional stock code filter (e.g. 000001)"
                }
            }
        }
    },
}
