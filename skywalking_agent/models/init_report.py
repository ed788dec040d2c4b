"""
初始化记录 - 配置初始化一次运行的阶段与结果

阶段流转：
    START -> FILE_LOADED | FILE_LOAD_FAILED
          -> OVERRIDES_APPLIED | OVERRIDE_FAILED
          -> VALIDATED | VALIDATION_FAILED
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class InitStage(str, Enum):
    """初始化阶段"""
    START = "START"
    FILE_LOADED = "FILE_LOADED"
    FILE_LOAD_FAILED = "FILE_LOAD_FAILED"              # 记录日志，使用默认值继续
    OVERRIDES_APPLIED = "OVERRIDES_APPLIED"
    OVERRIDE_FAILED = "OVERRIDE_FAILED"                # 记录日志，继续
    VALIDATED = "VALIDATED"                            # 终态：成功
    VALIDATION_FAILED = "VALIDATION_FAILED"            # 终态：致命


class InitReport(BaseModel):
    """初始化过程记录"""
    stages: list[InitStage] = Field(default_factory=lambda: [InitStage.START])
    config_file: Path | None = None

    file_keys: list[str] = Field(default_factory=list, description="文件层写入的key")
    override_keys: list[str] = Field(default_factory=list, description="覆盖层写入的key")
    errors: list[str] = Field(default_factory=list, description="错误信息")

    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def stage(self) -> InitStage:
        return self.stages[-1]

    @property
    def succeeded(self) -> bool:
        return self.stage == InitStage.VALIDATED

    def mark(self, stage: InitStage) -> None:
        """进入下一阶段"""
        self.stages.append(stage)
        if stage in (InitStage.VALIDATED, InitStage.VALIDATION_FAILED):
            self.finished_at = datetime.now()

    def mark_failed(self, stage: InitStage, error: str) -> None:
        """进入失败阶段并记录原因"""
        self.errors.append(error)
        self.mark(stage)
