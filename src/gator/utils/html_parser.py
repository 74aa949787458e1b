"""HTML 解析工具."""

import re

from bs4 import BeautifulSoup


def html_to_text(html: str | None) -> str:
    """
    将 Feed 摘要中的 HTML 转换为纯文本.

    Args:
        html: HTML 内容

    Returns:
        提取的纯文本内容
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "lxml")

    for element in soup(["script", "style"]):
        element.decompose()

    text = soup.get_text(separator="\n")

    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(line for line in lines if line)

    # 合并连续空白
    text = re.sub(r"[ \t]{2,}", " ", text)

    return text.strip()
