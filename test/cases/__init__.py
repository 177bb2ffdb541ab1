import os
import importlib

from test.walker import Walker
from test.misc import distribute_patterns, remove_content


class Cleaner(Walker):
    def process(self, files, dirs):
        remove_content(self.loc, names=["__pycache__"], extensions=[".png"])
        for d in dirs:
            Cleaner(d).walk()


def clean():
    Cleaner(os.path.split(__file__)[0]).walk()


class Collector(Walker):
    def __init__(self, loc, modname, found):
        super().__init__(loc)
        self.modname = modname
        self.found = found

    def process(self, files, dirs):
        if not dirs:
            self.found.append((self.modname, self.loc))
        for d in dirs:
            Collector(d, self.modname + "." + os.path.split(d)[1], self.found).walk()


def collect():
    found = []
    Collector(os.path.split(__file__)[0], __name__, found).walk()
    return found


class Runner(Walker):
    def __init__(self, loc, ctx, modname, report, patterns):
        super().__init__(loc)
        self.ctx = ctx
        self.modname = modname
        self.report = report
        self.patterns = patterns

    def fork(self, dirs):
        dd = {os.path.split(d)[1]: d for d in dirs}
        children = []

        for d, p in distribute_patterns(list(dd.keys()), self.patterns):
            children.append(Runner(
                dd[d], self.ctx,
                self.modname + "." + d,
                self.report, p,
            ))
        return children

    def process(self, files, dirs):
        module = importlib.import_module(self.modname)

        children = self.fork(dirs)
        if len(children) > 0:
            for child in children:
                child.walk()
            return

        try:
            Tester = module.Tester
        except AttributeError:
            self.report.warn(self.modname, "no `Tester` class")
            return

        try:
            on_device = Tester(self.ctx, self.loc).test_all()
        except Exception as e:
            self.report.fail(self.modname, e)
        else:
            if on_device:
                self.report.ok(self.modname)
            else:
                self.report.warn(self.modname, "no OpenCL device, reference only")


def test(ctx, report, patterns):
    Runner(os.path.split(__file__)[0], ctx, __name__, report, patterns).walk()
