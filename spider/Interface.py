from spider.Core import Core, GameEvent


class Interface:
    """
    Observer of a Core. All callbacks are invoked synchronously after the change has
    been applied; implementations read the core but must not mutate it.
    """

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a game event is performed.
        :param event:
        :return:
        """
        self.notifyRedraw()

    def onUndo(self):
        """
        Invoked after the previous state has been restored.
        """
        self.notifyRedraw()

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass
