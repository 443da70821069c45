"""Screens of the application and the stack that runs them."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

from .mapfile import Map
from .profile import Profile


class StateAction(Enum):
    """What a finished state asks the manager to do next."""

    POP = auto()
    MENU = auto()
    OPTIONS = auto()
    PROFILE = auto()
    SETUP = auto()
    EDITOR = auto()
    EDITOR_SETTINGS = auto()


@dataclass
class Data:
    """What the states share: the current profile and map."""

    profile: Profile = field(default_factory=Profile)
    map: Map = field(default_factory=Map)


class State(ABC):
    """A screen driven by a fixed-step update loop."""

    delta_time = 1.0 / 128.0

    def __init__(self, window) -> None:
        self.window = window
        self.return_action = StateAction.POP
        self.active = True
        self.data: Data | None = None

    def init(self, data: Data) -> None:
        """Prepare the state to run, each time it comes to the top of the stack."""
        self.active = True
        self.return_action = StateAction.POP
        self.data = data

    def run(self, clock: Callable[[], float] | None = None) -> StateAction:
        """Loop until the state finishes and return what should happen next."""
        clock = clock or time.perf_counter
        elapsed = 0.0
        last = clock()
        while self.active:
            while elapsed > self.delta_time:
                self.handle_events()
                self.update()
                elapsed -= self.delta_time
            self.render()
            now = clock()
            elapsed += now - last
            last = now
        return self.return_action

    def finish(self, action: StateAction = StateAction.POP) -> None:
        """Stop the loop and report the given action."""
        self.return_action = action
        self.active = False

    @abstractmethod
    def handle_events(self) -> None: ...

    @abstractmethod
    def update(self) -> None: ...

    @abstractmethod
    def render(self) -> None: ...


StateFactory = Callable[[object], State]


class StateManager:
    """Runs a stack of states, pushing and popping on their requests."""

    def __init__(
        self,
        window,
        factories: Mapping[StateAction, StateFactory],
        entry: StateAction = StateAction.MENU,
    ) -> None:
        self.window = window
        self.factories = dict(factories)
        self.states: list[State] = [self.factories[entry](window)]

    def run(self, clock: Callable[[], float] | None = None) -> None:
        """Run states until the stack is empty."""
        data = Data()
        while self.states:
            top = self.states[-1]
            top.init(data)
            action = top.run(clock)
            factory = self.factories.get(action)
            if action is StateAction.POP or factory is None:
                self.states.pop()
            else:
                self.states.append(factory(self.window))