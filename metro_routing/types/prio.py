### MetroRoutingEngine internal types - priority queue for graph searches

import itertools as it, operator as op, functools as ft
import heapq

from .. import utils as u


@u.attr_struct(eq=False)
@ft.total_ordering
class PrioItem:
	prio = u.attr_init()
	seq = u.attr_init()
	value = u.attr_init()

	def __hash__(self): return hash((self.prio, self.seq))
	def __eq__(self, item): return (self.prio, self.seq) == (item.prio, item.seq)
	def __lt__(self, item): return (self.prio, self.seq) < (item.prio, item.seq)

	@classmethod
	def get_factory(cls, prio_attrs):
		'Factory to wrap values into PrioItem, with prio from attr name(s) or a key func.'
		if len(prio_attrs) == 1 and callable(prio_attrs[0]): prio_func = prio_attrs[0]
		else: prio_func = op.attrgetter(*prio_attrs)
		return lambda v, seq: cls(prio_func(v), seq, v)


class PrioQueue:
	'''Min-heap of values, ordered by prio attrs.
		Values with equal prio are popped in the same order they were pushed.'''

	def __init__(self, *prio_attrs):
		self.items, self.item_func = list(), PrioItem.get_factory(prio_attrs)
		self.seq = it.count()

	def __len__(self): return len(self.items)
	def push(self, value): heapq.heappush(self.items, self.item_func(value, next(self.seq)))
	def pop(self): return heapq.heappop(self.items).value
	def peek(self): return self.items[0].value
