# app/hooks.py


class NoopHooks:
    def route_committed(self, **_):
        pass

    def route_removed(self, **_):
        pass

    def graph_compiled(self, **_):
        pass

    def path_found(self, **_):
        pass

    def path_failed(self, **_):
        pass

    def selection(self, **_):
        pass
