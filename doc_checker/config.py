"""
配置模块 - 检查器的可配置项

唯一的配置项是允许的代码块语言集合。来源优先级：
命令行 --allow-lang > 环境变量 DOC_CHECKER_ALLOWED_LANGUAGES > 默认值。
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional


ALLOWED_LANGUAGES_ENV = "DOC_CHECKER_ALLOWED_LANGUAGES"

DEFAULT_ALLOWED_LANGUAGES: frozenset[str] = frozenset({"bash", "sql", "text"})


class ConfigError(ValueError):
    """配置值无效"""


@dataclass(frozen=True)
class CheckerConfig:
    """
    检查器配置

    Attributes:
        allowed_languages: 允许的代码块语言标记（小写）
    """
    allowed_languages: frozenset[str] = field(
        default_factory=lambda: DEFAULT_ALLOWED_LANGUAGES
    )

    @classmethod
    def from_languages(cls, languages: Optional[Iterable[str]]) -> "CheckerConfig":
        """
        从语言列表构建配置

        每个元素可以是逗号分隔的多个语言（环境变量就是这种格式）。
        传入 None 或空列表时使用默认值。

        Raises:
            ConfigError: 给出了值但解析后为空
        """
        if not languages:
            return cls()

        normalized = frozenset(
            part.strip().lower()
            for value in languages
            for part in value.split(",")
            if part.strip()
        )
        if not normalized:
            raise ConfigError("allowed languages must not be empty")
        return cls(allowed_languages=normalized)

    def is_allowed(self, language: str) -> bool:
        return language.lower() in self.allowed_languages
