# graph/graph.py
from langgraph.graph import StateGraph, END
from graph.state import EventPipelineState


def route_after_parse(state: EventPipelineState) -> str:
    if state["action_taken"] == "rejected":
        return "notify"
    return "apply_event"


def build_graph(event_log=None, notifier=None):
    """イベント処理のLangGraphグラフを構築して返す

    parse_event → apply_event → persist_event → notify の順に流れる。
    解析に失敗した行は適用・永続化を経ずに notify へ進む。
    サービス引数を省略した場合、そのノードは何もしない（テスト用）。
    """
    from functools import partial
    from graph.nodes.parse_event_node import parse_event_node
    from graph.nodes.apply_event_node import apply_event_node
    from graph.nodes.persist_event_node import persist_event_node
    from graph.nodes.notify_node import notify_node

    persist_wrapped = partial(persist_event_node, event_log=event_log)
    notify_wrapped = partial(notify_node, notifier=notifier)

    workflow = StateGraph(EventPipelineState)

    workflow.add_node("parse_event", parse_event_node)
    workflow.add_node("apply_event", apply_event_node)
    workflow.add_node("persist_event", persist_wrapped)
    workflow.add_node("notify", notify_wrapped)

    workflow.set_entry_point("parse_event")

    workflow.add_conditional_edges(
        "parse_event",
        route_after_parse,
        {"apply_event": "apply_event", "notify": "notify"},
    )

    workflow.add_edge("apply_event", "persist_event")
    workflow.add_edge("persist_event", "notify")
    workflow.add_edge("notify", END)

    return workflow.compile()
