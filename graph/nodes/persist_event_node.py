# graph/nodes/persist_event_node.py
from graph.state import EventPipelineState


def persist_event_node(state: EventPipelineState, event_log=None) -> dict:
    """適用済みイベントをイベントログに追記するノード"""
    if event_log is not None:
        event_log.append(state["event"])
    return {}
