import itertools as it, operator as op, functools as ft
from collections import namedtuple

from . import utils as u, types as t, fare, cache


@u.attr_struct(vals_to_attrs=True)
class EngineConf:
	max_alternative_routes = 3 # including the shortest one
	max_route_deviation = 1.5 # max alternative-to-shortest route distance ratio
	cache_key_with_mode = False # False keeps time/hops cache collisions, see cache.RouteCache
	search_depth_max = None # max stations in alternative routes, None - station count


def timer(self_or_func, func=None, *args, **kws):
	'Calculation call wrapper for timer logging.'
	if not func: return lambda s,*a,**k: s.timer_wrapper(self_or_func, s, *a, **k)
	return self_or_func.timer_wrapper(func, *args, **kws)


class MetroRoutingEngine:
	'''Route, fare and alternative-path queries over a static Network.
		All queries take station names, which must match the ones in the network exactly,
			raising UnknownStationError otherwise, while None is returned for no-route cases.'''

	SearchLabel = namedtuple('SearchLabel', 'dist station_id')

	def __init__(self, network, conf=None, conf_fare=None, timer_func=None):
		self.conf, self.log = conf or EngineConf(), u.get_logger('metro')
		self.conf_fare = conf_fare or fare.FareConf()
		self.timer_wrapper = timer_func if timer_func else lambda f,*a,**k: f(*a,**k)
		self.network = network
		self.cache = cache.RouteCache(key_mode=self.conf.cache_key_with_mode)


	def is_valid_station(self, name): return self.network.is_valid_station(name)
	def station_names(self): return self.network.station_names()

	def path_distance(self, path): return self.network.path_distance(path)

	def route(self, path):
		if not path: return
		return t.public.Route( tuple(path),
			self.network.path_distance(path), self.network.path_stations(path) )


	def shortest_path(self, station_src, station_dst, time_optimized=True):
		'''Dijkstra search between two station ids.
			Uses edge weights if time_optimized, otherwise 1 for every hop,
				which finds paths with the least number of stations.
			Returns list of station ids or None, if dst is not reachable from src.'''
		network, SearchLabel = self.network, self.SearchLabel
		dist, prev = [u.inf] * len(network), [None] * len(network)
		dist[station_src] = 0

		queue = t.prio.PrioQueue('dist')
		queue.push(SearchLabel(0, station_src))
		while queue:
			label = queue.pop()
			n = label.station_id
			if n == station_dst: break
			if label.dist > dist[n]: continue # stale label, already relaxed via shorter one
			for edge in network.edges_from(n):
				weight = edge.weight if time_optimized else 1
				if dist[n] + weight < dist[edge.dst]:
					dist[edge.dst], prev[edge.dst] = dist[n] + weight, n
					queue.push(SearchLabel(dist[edge.dst], edge.dst))

		if dist[station_dst] is u.inf: return
		path, n = list(), station_dst
		while n is not None:
			path.append(n)
			n = prev[n]
		path.reverse()
		return path

	@timer
	def find_shortest_path(self, name_src, name_dst, time_optimized=True):
		'''Cached shortest_path() lookup by station names.
			Returns list of station ids or None, if there is no path.'''
		a, b = map(self.network.station_id, [name_src, name_dst])
		path = self.cache.get(name_src, name_dst, time_optimized)
		if path is not None: return path

		path = self.shortest_path(a, b, time_optimized)
		if not path or path[0] != a:
			self.log.debug('No path found: {!r} -> {!r}', name_src, name_dst)
			return
		self.cache.add(name_src, name_dst, time_optimized, path)
		return path

	def route_details(self, name_src, name_dst, time_optimized=True):
		'Ordered list of station names on the route, followed by end-marker, or None.'
		route = self.route(self.find_shortest_path(name_src, name_dst, time_optimized))
		return route and route.details()


	def iter_simple_paths(self, station_src, station_dst, dist_max=u.inf, depth_max=None):
		'''Yield all simple (no repeated stations) paths from src to dst,
				with sum of traversed edge weights not exceeding dist_max.
			Depth-first search with an explicit stack of adjacency iterators.'''
		if depth_max is None: depth_max = self.conf.search_depth_max or len(self.network)
		if station_src == station_dst:
			yield [station_src]
			return

		path, dists, visited = [station_src], [0], {station_src}
		stack = [iter(self.network.edges_from(station_src))]
		while stack:
			edge = next(stack[-1], None)
			if edge is None: # all edges from path tip checked
				stack.pop()
				visited.discard(path.pop())
				dists.pop()
				continue
			if edge.dst in visited: continue
			dist = dists[-1] + edge.weight
			if dist > dist_max: continue # weights are positive, so it can only get longer
			if len(path) >= depth_max: continue
			if edge.dst == station_dst:
				yield path + [station_dst]
				continue
			path.append(edge.dst)
			dists.append(dist)
			visited.add(edge.dst)
			stack.append(iter(self.network.edges_from(edge.dst)))

	@timer
	def query_alternative_routes(self, name_src, name_dst):
		'''Find shortest route and up to (max_alternative_routes - 1) other simple routes,
				with distance within max_route_deviation ratio of the shortest one.
			Returns RouteSet or None if there are no routes between stations at all.'''
		path = self.find_shortest_path(name_src, name_dst, True)
		if not path: return
		shortest = self.route(path)
		dist_max = shortest.distance * self.conf.max_route_deviation

		paths = set( tuple(path) for path in
			self.iter_simple_paths(path[0], path[-1], dist_max) )
		paths.discard(shortest.path)
		routes = sorted( (self.route(path) for path in paths),
			key=lambda route: (route.distance, len(route), route.path) )
		routes = list(route for route in routes if route.distance <= dist_max)
		routes = routes[:max(0, self.conf.max_alternative_routes - 1)]

		self.log.debug( 'Alternative routes {!r} -> {!r}: candidates={},'
			' shown={}, distance-max={}', name_src, name_dst, len(paths), len(routes), dist_max )
		return t.public.RouteSet(shortest, routes)


	def calc_fare(self, name_src, name_dst, student=False, senior=False):
		'Authoritative fare for time-optimized route, or 0 if there is no such route.'
		path = self.find_shortest_path(name_src, name_dst, True)
		return fare.fare_for_path(self.network, path, student, senior, self.conf_fare)

	def route_fare(self, route, student=False, senior=False):
		return fare.fare_for_path(
			self.network, route and route.path, student, senior, self.conf_fare )

	def quick_estimate(self, path): return fare.quick_estimate(path, self.conf_fare)

	def generate_bill(self, passenger, name_src, name_dst):
		amount = passenger.bill(self.calc_fare(
			name_src, name_dst, passenger.student, passenger.senior ))
		self.log.debug( 'Bill for {!r} ({!r} -> {!r}): {}',
			passenger.name, name_src, name_dst, amount )
		return t.public.Bill(passenger.name, passenger.phone_no, amount)

	@timer
	def query_minimal_transfer_path(self, passenger, name_src, name_dst):
		'''Route with the least number of stations, its quick price estimate,
			and the bill (for time-optimized route) generated for the passenger.'''
		path = self.find_shortest_path(name_src, name_dst, False)
		bill = self.generate_bill(passenger, name_src, name_dst)
		return t.public.TransferQuote(self.route(path), self.quick_estimate(path), bill)

	def is_on_path(self, name_src, name_mid, name_dst):
		'Check whether mid station is on the hop-minimized path between src and dst.'
		station_mid = self.network.station_id(name_mid)
		path = self.find_shortest_path(name_src, name_dst, False)
		return bool(path) and station_mid in path

	@timer
	def change_route(self, passenger, name_src, name_mid, name_dst_new, name_dst):
		'''Re-route passenger, getting off at mid station and continuing to a new destination.
			Bill is set to a sum of src -> mid and mid -> new-dst fares.
			Returns None and bills nothing if mid station is not on the current src -> name_dst route.'''
		if not self.is_on_path(name_src, name_mid, name_dst):
			self.log.debug( 'Station {!r} is not on the path:'
				' {!r} -> {!r}', name_mid, name_src, name_dst )
			return
		quote = self.query_minimal_transfer_path(passenger, name_mid, name_dst_new)
		student, senior = passenger.student, passenger.senior
		amount = passenger.bill(
			self.calc_fare(name_src, name_mid, student, senior)
			+ self.calc_fare(name_mid, name_dst_new, student, senior) )
		return t.public.RouteChange(
			self.route(self.find_shortest_path(name_src, name_mid, True)),
			self.route(self.find_shortest_path(name_mid, name_dst_new, True)),
			quote, t.public.Bill(passenger.name, passenger.phone_no, amount) )
