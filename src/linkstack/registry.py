""" The state-id namespace shared by cooperating actors. Every state in a
    deployment needs a distinct, non-zero integer id; two actors answering
    to the same id would both act on every message addressed to it. The
    :class:`Registry` is the one place those assignments are made, and it
    refuses conflicting assignments as soon as they are configured.
"""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional

from .protocol.fields import TERMINAL


class Registry:
    """ A bidirectional mapping between state names and state ids. To first
        order an instance acts like a dictionary keyed by state name.
        Names are case-insensitive.
    """

    def __init__(self, mapping: Optional[Mapping[str, int]] = None):

        self._by_name: Dict[str, int] = dict()
        self._by_id: Dict[int, str] = dict()

        if mapping:
            self.update(mapping)


    @classmethod
    def from_dict(cls, mapping: Mapping[str, int]) -> Registry:
        """ Build a :class:`Registry` from a name -> id mapping, validating
            every assignment. Nothing is registered if any entry is invalid.
        """

        registry = cls()
        registry.update(mapping)
        return registry


    def __contains__(self, name):
        return str(name).lower() in self._by_name


    def __getitem__(self, name) -> int:

        name = str(name).lower()

        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError('state not registered: ' + name)


    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)


    def __len__(self):
        return len(self._by_name)


    def __repr__(self):
        return 'Registry(%r)' % (self._by_name,)


    def name(self, state_id: int) -> str:
        """ Return the state name registered for *state_id*.
        """

        try:
            return self._by_id[int(state_id)]
        except KeyError:
            raise KeyError('state id not registered: ' + str(state_id))


    def register(self, name: str, state_id: int) -> int:
        """ Assign *state_id* to the state *name*. Zero is reserved, and
            neither the name nor the id may already be in use.
        """

        name, state_id = self._check(name, state_id, self._by_name, self._by_id)

        self._by_name[name] = state_id
        self._by_id[state_id] = name
        return state_id


    def resolve(self, state) -> int:
        """ Return the state id for *state*, which may already be an id or
            may be a registered state name.
        """

        if isinstance(state, int):
            return state

        return self[state]


    def to_dict(self) -> Dict[str, int]:
        return dict(self._by_name)


    def update(self, mapping: Mapping[str, int]) -> None:
        """ Register every name -> id pair in *mapping*. The whole mapping is
            validated before any of it is registered.
        """

        by_name = dict(self._by_name)
        by_id = dict(self._by_id)

        for name, state_id in mapping.items():
            name, state_id = self._check(name, state_id, by_name, by_id)
            by_name[name] = state_id
            by_id[state_id] = name

        self._by_name = by_name
        self._by_id = by_id


    @staticmethod
    def _check(name, state_id, by_name, by_id):

        name = str(name).lower()

        if name == '':
            raise ValueError('state names cannot be empty')

        try:
            state_id = int(state_id)
        except (TypeError, ValueError):
            raise ValueError('state id for %r is not an integer: %r' % (name, state_id))

        if state_id == TERMINAL:
            raise ValueError('state id 0 is reserved, cannot assign it to ' + repr(name))

        if name in by_name:
            raise ValueError('state %r is already registered as %d' % (name, by_name[name]))

        if state_id in by_id:
            raise ValueError('state id %d is already registered to %r' % (state_id, by_id[state_id]))

        return name, state_id


# end of class Registry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
