# graph/nodes/parse_event_node.py
from graph.events import MalformedEventRecord, parse_event
from graph.state import EventPipelineState


def parse_event_node(state: EventPipelineState) -> dict:
    """永続化形式の行をイベントに変換するノード（解析済みなら何もしない）"""
    if state["event"] is not None:
        return {}

    if state["raw"] is None:
        return {"action_taken": "rejected", "error_message": "イベントが指定されていません"}

    try:
        return {"event": parse_event(state["raw"])}
    except MalformedEventRecord as e:
        return {"action_taken": "rejected", "error_message": str(e)}
