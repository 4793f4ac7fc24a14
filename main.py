# main.py
from route_graph.app.session import build


def run():
    session = build({"name": "demo", "render": {"sink": "jsonl"}})

    # Two hand-drawn streets meeting at a corner
    session.commit_route([(-74.0090, 40.7128), (-74.0080, 40.7128)])
    session.commit_route([(-74.0080, 40.7128), (-74.0080, 40.7138)])
    session.compile()

    # Two map clicks, as delivered by the map's click handler
    session.selection.enable()
    session.selection.click({"lng": -74.00901, "lat": 40.71281})
    session.selection.click({"lng": -74.00799, "lat": 40.71379})

    result = session.find_path()
    for c in result.unwrap():
        print(f"{c.lng:.4f}, {c.lat:.4f}")


if __name__ == "__main__":
    run()
