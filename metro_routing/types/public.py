import itertools as it, operator as op, functools as ft
from collections import namedtuple
import contextlib, re

from .. import utils as u


class NetworkError(Exception): pass
class UnknownStationError(NetworkError, KeyError): pass
class PassengerError(ValueError): pass


### MetroRoutingEngine input data

# Fixed set of stations with dense 0..N-1 ids,
#  connected by undirected edges with positive integer weights (distance units).


@u.attr_struct(repr=False, eq=False)
class Station:
	keys = 'id name'
	def __hash__(self): return hash(self.id)
	def __eq__(self, station): return u.same_type_and_id(self, station)
	def __repr__(self): return '<Station {} [{}]>'.format(self.name, self.id)

Edge = namedtuple('Edge', 'dst weight') # adjacency-list entry


class Network:
	'''Adjacency-list graph of a fixed number of stations.
		Populated once (see populate() method) and read-only after that.'''

	def __init__(self, station_count):
		self.station_count, self.sealed = station_count, False
		self.adj = list(list() for n in range(station_count))
		self.stations, self.idx_name = [None] * station_count, dict()

	@contextlib.contextmanager
	def populate(self):
		if self.sealed: raise NetworkError('Network is already populated and sealed')
		yield self
		self.seal()

	def seal(self):
		missing = list(n for n, station in enumerate(self.stations) if not station)
		if missing:
			raise NetworkError( 'Station ids must form a dense'
				' 0..{} range, missing: {}'.format(self.station_count - 1, missing) )
		self.sealed = True

	def add_station(self, name, station_id):
		assert 0 <= station_id < self.station_count, station_id
		if self.sealed: raise NetworkError('Cannot add station to a sealed network', name)
		if name in self.idx_name:
			raise NetworkError('Duplicate station name: {!r}'.format(name))
		if self.stations[station_id]:
			raise NetworkError('Duplicate station id: {} ({!r} and {!r})'.format(
				station_id, self.stations[station_id].name, name ))
		station = self.stations[station_id] = Station(station_id, name)
		self.idx_name[name] = station
		return station

	def add_edge(self, a, b, weight):
		assert 0 <= a < self.station_count and 0 <= b < self.station_count, [a, b]
		if self.sealed: raise NetworkError('Cannot add edge to a sealed network', a, b)
		self.adj[a].append(Edge(b, weight))
		self.adj[b].append(Edge(a, weight))

	def is_valid_station(self, name): return name in self.idx_name

	def station_id(self, name):
		try: return self.idx_name[name].id
		except KeyError: raise UnknownStationError(name) from None

	def station_names(self): return list(map(op.attrgetter('name'), self.stations))

	def edges_from(self, station_id): return self.adj[station_id]

	def edge_weight(self, a, b):
		'Weight of the first a->b adjacency entry, or None if stations are not adjacent.'
		for edge in self.adj[a]:
			if edge.dst == b: return edge.weight

	def path_distance(self, path):
		'Sum of weights for edges actually present between consecutive path stations.'
		distance = 0
		for a, b in zip(path, path[1:]):
			weight = self.edge_weight(a, b)
			if weight is not None: distance += weight
		return distance

	def path_stations(self, path): return list(self.stations[n] for n in path)

	def stat_edge_count(self): return sum(map(len, self.adj)) // 2

	def __getitem__(self, station_id): return self.stations[station_id]
	def __len__(self): return self.station_count
	def __iter__(self): return iter(self.stations)


### MetroRoutingEngine query results

route_end_marker = 'End'

@u.attr_struct(repr=False)
class Route:
	path = u.attr_init() # tuple of station ids
	distance = u.attr_init()
	stations = u.attr_init()

	@property
	def names(self): return list(map(op.attrgetter('name'), self.stations))

	def details(self, end_marker=route_end_marker):
		'Ordered station names, followed by terminal marker.'
		return self.names + [end_marker]

	def __len__(self): return len(self.path)
	def __iter__(self): return iter(self.stations)
	def __repr__(self):
		return '<Route[ {} ] distance={}>'.format(' - '.join(self.names), self.distance)

	def pretty_print(self, fare=None, indent=0, **print_kws):
		p = lambda tpl,*a,**k: print(' '*indent + tpl.format(*a,**k), **print_kws)
		p(' -> '.join(self.details()))
		p('Distance: {} units', self.distance)
		if fare is not None: p('Price: {}', fare)


@u.attr_struct
class RouteSet:
	'Shortest route and ranked alternatives to it (within deviation threshold).'
	shortest = u.attr_init()
	alternatives = u.attr_init(list)

	@property
	def found(self): return bool(self.alternatives)

	def __len__(self): return 1 + len(self.alternatives)
	def __iter__(self): return iter([self.shortest] + self.alternatives)

	def pretty_print(self, fare_func=None, indent=0, **print_kws):
		p = lambda tpl,*a,**k: print(' '*indent + tpl.format(*a,**k), **print_kws)
		fare_func = fare_func or (lambda route: None)
		p('Shortest Route:')
		self.shortest.pretty_print(fare_func(self.shortest), indent=indent, **print_kws)
		p('')
		p('Alternative Routes:')
		if not self.found:
			p('No alternative routes found within acceptable distance.')
		for route in self.alternatives:
			route.pretty_print(fare_func(route), indent=indent, **print_kws)
			p('')


### Riders

def _check_name(passenger, attribute, name):
	if not isinstance(name, str) or not name.strip():
		raise PassengerError('Name cannot be empty')

def _check_age(passenger, attribute, age):
	if isinstance(age, bool) or not isinstance(age, int) or not 0 < age <= 120:
		raise PassengerError('Invalid age: {!r}'.format(age))

def _phone_no(phone_no):
	phone_no = str(phone_no).strip()
	if not re.fullmatch(r'[0-9]{10}', phone_no):
		raise PassengerError('Phone number must be 10 digits')
	return phone_no

@u.attr_struct
class Passenger:
	'''Rider record, validated on construction.
		Student status can be (re-)classified only until first bill is generated,
			while senior status is always derived from age when record is created.'''
	name = u.attr_init(validator=_check_name)
	age = u.attr_init(validator=_check_age)
	phone_no = u.attr_init(converter=_phone_no)
	student = u.attr_init(False, converter=bool)
	senior = u.attr_init(init=False)
	bill_amount = u.attr_init(0.0, init=False)
	billed = u.attr_init(False, init=False)

	def __attrs_post_init__(self): self.senior = self.age >= 60

	def classify(self, student):
		if self.billed:
			raise PassengerError('Cannot change rider classification after bill was generated')
		self.student = bool(student)
		return self

	def bill(self, amount):
		self.bill_amount, self.billed = amount, True
		return amount


@u.attr_struct
class Bill:
	keys = 'passenger_name phone_no amount'

	def pretty_print(self, indent=0, **print_kws):
		p = lambda tpl,*a,**k: print(' '*indent + tpl.format(*a,**k), **print_kws)
		p('Passenger: {}', self.passenger_name)
		p('Phone Number: {}', self.phone_no)
		p('Bill Amount: {}', self.amount)

@u.attr_struct
class TransferQuote:
	'Minimal-transfer route with its quick price estimate and the resulting bill.'
	keys = 'route estimate bill'

@u.attr_struct
class RouteChange:
	keys = 'leg_done leg_new quote bill'
