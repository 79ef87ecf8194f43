"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from doc_checker.core.validator import ValidationResult


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def build(self, results: list[ValidationResult], target: str) -> dict:
        """构建报告数据"""
        total_issues = sum(len(r.issues) for r in results)
        return {
            "target": target,
            "files": [
                {
                    "path": result.path,
                    "issues": [
                        {
                            "kind": issue.code,
                            "line_number": issue.line_number,
                            "message": issue.message,
                            "suggestion": issue.suggestion,
                            "related_lines": list(issue.related_lines),
                        }
                        for issue in result.issues
                    ],
                    "stats": result.stats,
                }
                for result in results
            ],
            "summary": {
                "total_issues": total_issues,
                "files_checked": len(results),
                "passed": total_issues == 0,
            },
        }

    def report(self, results: list[ValidationResult], target: str) -> None:
        """生成 JSON 格式报告"""
        json_str = json.dumps(self.build(results, target), indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
