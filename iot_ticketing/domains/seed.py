"""
Sample tickets used to populate an empty store for demos.
"""
import datetime
from typing import List, Optional

from iot_ticketing.domains.enums import Priority, Role, TicketStatus
from iot_ticketing.domains.tickets import Diagnosis, Ticket, utc_now


def demo_tickets(now: Optional[datetime.datetime] = None) -> List[Ticket]:
    """Build the demo tickets with timestamps relative to now, newest first."""
    now = now or utc_now()

    def hours(n: int) -> datetime.datetime:
        return now - datetime.timedelta(hours=n)

    return [
        Ticket(
            id="TKT-20231027-001",
            title="某区域物联网设备批量掉线",
            content="接到客户投诉，位于高新园区的智能水表大面积无法上报数据，持续时间约2小时。",
            priority=Priority.HIGH,
            status=TicketStatus.PROCESSING,
            creator=Role.FRONT_SUPPORT,
            created_at=hours(4),
            assigned_teams=[Role.CORE_NET, Role.NET_OPT],
            diagnoses=[
                Diagnosis(
                    role=Role.CORE_NET,
                    content="核心网侧HSS数据正常，未发现批量鉴权失败告警。PGW链路负载正常。",
                    timestamp=hours(2),
                )
            ],
            preliminary_judgment="怀疑是基站侧或核心网链路问题，请核查。",
        ),
        Ticket(
            id="TKT-20231027-002",
            title="专线网络延迟高",
            content="VIP客户反馈视频监控回传卡顿，延迟超过200ms。",
            priority=Priority.MEDIUM,
            status=TicketStatus.PENDING,
            creator=Role.FRONT_SUPPORT,
            created_at=now - datetime.timedelta(minutes=30),
        ),
        Ticket(
            id="TKT-20231026-005",
            title="5G切片配置错误导致无法接入",
            content="新开通的智慧工厂项目，终端显示注册网络失败。",
            priority=Priority.HIGH,
            status=TicketStatus.RESOLVED,
            creator=Role.FRONT_SUPPORT,
            created_at=hours(26),
            diagnoses=[
                Diagnosis(
                    role=Role.CORE_NET,
                    content="经核查，DNN配置参数有误，已修正切片S-NSSAI参数。",
                    timestamp=hours(20),
                )
            ],
            preliminary_judgment="需核对开通参数。",
            ai_analysis="根据核心网班组反馈，故障原因为DNN参数配置错误。建议：1. 修正侧参数。2. 将此类问题录入自动核查脚本。",
            resolution="参数已修改，业务恢复正常。",
            resolved_at=hours(18),
        ),
    ]
