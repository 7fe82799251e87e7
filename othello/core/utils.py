def format_search_info(side, point, score, evaluations, nodes, elapsed):
    eps = int(evaluations / elapsed) if elapsed > 0 else 0
    move_str = f"{point.x},{point.y}" if point is not None else "-"
    return (
        f"info side {side.value} move {move_str} score {score} "
        f"evals {evaluations} nodes {nodes} eps {eps} time {int(elapsed * 1000)}"
    )
