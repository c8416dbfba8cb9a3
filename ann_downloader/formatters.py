"""
Plain-text formatters for handler results

Used by both the CLI and the MCP server for consistent presentation.
"""

from typing import Any


def format_download(result: dict[str, Any]) -> str:
    """Format download_announcements result.

    Example output:
        DOWNLOAD category_ndbg_szsh | 1 downloaded | 2 skipped

        000001 平安银行 (3 listed)
          [downloaded] 2022年年度报告
          [skipped]    2021年年度报告
        DIR: /home/me/Dropbox/Personal/年报/000001.平安银行
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    lines = [
        f"DOWNLOAD {result['category']} | {result['downloaded']} downloaded | {result['skipped']} skipped"
    ]

    for company in result["companies"]:
        lines.append("")
        lines.append(f"{company['code']} {company['name']} ({company['total_listed']} listed)")
        for doc in company["documents"]:
            status = f"[{doc['status']}]"
            lines.append(f"  {status:<12} {doc['title']}")
        if not company["documents"]:
            lines.append("  (nothing selected)")
        for year in company["missing_years"]:
            lines.append(f"  MISSING: {year}")
        lines.append(f"DIR: {company['directory']}")

    return "\n".join(lines)


def format_list_announcements(result: dict[str, Any]) -> str:
    """Format list_announcements result.

    Example output:
        LIST category_ndbg_szsh

        000001 平安银行 (3 listed, 2 selected)
          * 2022年年度报告      http://static.cninfo.com.cn/finalpage/...
            2021年年度报告      http://static.cninfo.com.cn/finalpage/...

        * = already downloaded
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    lines = [f"LIST {result['category']}"]

    for company in result["companies"]:
        docs = company["documents"]
        lines.append("")
        lines.append(f"{company['code']} {company['name']} ({company['total_listed']} listed, {len(docs)} selected)")
        for doc in docs:
            marker = "*" if doc["downloaded"] else " "
            lines.append(f"  {marker} {doc['title']}  {doc['url']}")
        for year in company["missing_years"]:
            lines.append(f"  MISSING: {year}")

    lines.append("")
    lines.append("* = already downloaded")
    return "\n".join(lines)


def format_list_downloaded(result: dict[str, Any]) -> str:
    """Format list_downloaded result"""
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    lines = [f"DOWNLOADED ({result['count']} files | {result['disk_usage_mb']} MB)"]
    lines.append("─" * 70)
    for f in result["files"]:
        size_kb = f["size_bytes"] / 1024
        lines.append(f"{f['code']:<8} {f['name']:<10} {size_kb:>8.0f} KB  {f['title']}")

    return "\n".join(lines)
