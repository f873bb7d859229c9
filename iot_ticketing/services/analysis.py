"""
Analysis service implementation.

Drafts a consolidated fault analysis report for a ticket from its diagnoses
and from resolved cases in the case library.
"""
import logging
from typing import List, Optional

from iot_ticketing.domains.errors import CollaboratorError
from iot_ticketing.domains.tickets import Ticket
from iot_ticketing.interfaces.providers.llm import LLMProvider
from iot_ticketing.interfaces.services.analysis import (
    AnalysisService as AnalysisServiceInterface,
)
from iot_ticketing.repositories.ticket import TicketRepository

# Setup logger for this module
logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "你是一名资深的物联网网络故障处理专家，拥有丰富的一线排查经验和理论知识。"

OFFLINE_REPORT = """[模拟 AI 分析模式]
由于缺少 API Key，无法进行实时智能分析。
模拟分析结果：
1. 根据各班组反馈，疑似核心网侧配置参数存在异常。
2. 建议核查 HSS 和 PGW 之间的链路配置。
3. 参考类似案例：TKT-20231026-005。"""

NO_CASES_TEXT = "暂无相关历史案例。"

REPORT_PROMPT = """
任务：基于提供的【参考知识库】和【当前工单详情】，生成一份深度研判分析报告。

目标：
1. 准确判断故障根因。
2. 必须深度挖掘历史案例，直接引用历史案例的【最终解决方案 (Resolution)】来指导当前的修复工作。
3. 给出可执行的分步解决方案。
4. 提出长效的预防措施。

=== 参考知识库 (Historical Solutions) ===
{knowledge_context}

=== 当前工单详情 (Current Ticket) ===
工单标题: {title}
故障描述: {content}
客响班初步研判: {preliminary_judgment}

各专业班组诊断记录 (已完成的排查动作):
{diagnoses}

=== 输出格式要求 (Markdown) ===
请严格按照以下章节生成报告：

### 1. 深度故障根因分析 (Deep Root Cause Analysis)
### 2. 知识库智能关联 (Knowledge Base Correlation)
*   若发现相似案例，请写出“参考历史案例 [案例标题]”，并完整摘录其【最终解决方案 (Resolution)】。
*   说明该历史解决方案是否可以直接应用于当前故障。
*   若无相似案例，请明确说明“未找到强相关历史案例”。
### 3. 分步处理与执行方案 (Step-by-Step Action Plan)
### 4. 预防性维护建议 (Preventative Measures)
### 5. 协同工作流 (Collaboration)
"""


class AnalysisService(AnalysisServiceInterface):
    """Service for drafting ticket analysis reports with a language model."""

    def __init__(
        self,
        ticket_repository: TicketRepository,
        llm_provider: Optional[LLMProvider] = None,
        case_library_size: int = 5,
        model: Optional[str] = None,
    ) -> None:
        """Initialize the analysis service.

        Args:
            ticket_repository: Repository used to look up resolved reference cases
            llm_provider: Language model provider; offline mode when None
            case_library_size: Maximum number of reference cases in the prompt
            model: Optional model override passed to the provider
        """
        self.ticket_repository = ticket_repository
        self.llm_provider = llm_provider
        self.case_library_size = case_library_size
        self.model = model

    def _format_cases(self, cases: List[Ticket]) -> str:
        if not cases:
            return NO_CASES_TEXT

        blocks = []
        for i, case in enumerate(cases, start=1):
            steps = "; ".join(f"({d.role.label}) {d.content}" for d in case.diagnoses)
            blocks.append(
                f"[参考案例 {i}]\n"
                f"标题: {case.title}\n"
                f"故障现象: {case.content}\n"
                f"关键诊断过程: {steps}\n"
                f"最终解决方案 (Resolution): {case.resolution}"
            )
        return "\n\n".join(blocks)

    def build_prompt(self, ticket: Ticket) -> str:
        """Render the report prompt for a ticket."""
        cases = [
            c for c in self.ticket_repository.get_resolved_cases()
            if c.id != ticket.id
        ][: self.case_library_size]

        return REPORT_PROMPT.format(
            knowledge_context=self._format_cases(cases),
            title=ticket.title,
            content=ticket.content,
            preliminary_judgment=ticket.preliminary_judgment or "无",
            diagnoses="\n".join(
                f"- [{d.role.label}]: {d.content}" for d in ticket.diagnoses
            ),
        )

    async def analyze(self, ticket: Ticket) -> str:
        if self.llm_provider is None:
            logger.warning(
                "No LLM provider configured. Returning offline analysis report."
            )
            return OFFLINE_REPORT

        prompt = self.build_prompt(ticket)
        try:
            report = await self.llm_provider.generate_text(
                prompt, system_prompt=SYSTEM_PROMPT, model=self.model
            )
        except Exception as e:
            logger.exception(f"Analysis generation failed for ticket {ticket.id}: {e}")
            raise CollaboratorError(
                f"Analysis service is temporarily unavailable: {e}"
            ) from e

        if not report or not report.strip():
            raise CollaboratorError("Analysis service returned an empty report")
        return report
