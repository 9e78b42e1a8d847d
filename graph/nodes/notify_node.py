from graph.events import describe_event
from graph.state import EventPipelineState


MESSAGES = {
    "applied": "✅ {description}",
    "rejected": "イベントを取り込めませんでした（{error}）",
}


def notify_node(state: EventPipelineState, notifier=None) -> dict:
    """イベント処理結果を通知するノード"""
    if notifier is None:
        return {}

    action = state["action_taken"]

    if action == "rejected":
        notifier.send_error(MESSAGES["rejected"].format(error=state["error_message"]))
    elif action == "applied":
        description = describe_event(state["event"], state["sheet"]["timezone"])
        notifier.send(MESSAGES["applied"].format(description=description))

    return {}
