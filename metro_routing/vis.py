# Visualization tools, mostly useful for debugging

import itertools as it, operator as op, functools as ft
import contextlib


print_fmt = lambda tpl, *a, file=None, end='\n', **k:\
	print(tpl.format(*a,**k), file=file, end=end)

dot_str = lambda n: '"{}"'.format(str(n).replace('"', '\\"'))


@contextlib.contextmanager
def dot_graph(dst, dot_opts, indent=2, graph_type='graph'):
	print_fmt('{} {{', graph_type, file=dst)
	if isinstance(indent, int): indent = ' '*indent
	p = lambda tpl, *a, end='\n', **k:\
		print_fmt(indent + tpl, *a, file=dst, end=end, **k)
	p('### Defaults')
	for t, opts in (dot_opts or dict()).items():
		p('{} [ {} ]', t, ', '.join('{}={}'.format(k, v) for k, v in opts.items()))
	yield p
	print_fmt('}}', file=dst)


def dot_for_network(network, dst, route=None, dot_opts=None, route_color='#2196F3'):
	'''Dump undirected station graph with edge weights as labels.
		Nodes/edges of the route (if specified) are highlighted.'''
	route_stations = set(route.path) if route else set()
	route_edges = set(
		frozenset(pair) for pair in zip(route.path, route.path[1:]) ) if route else set()
	node_name = lambda n: 'station-{}'.format(n)

	with dot_graph(dst, dot_opts) as p:
		p('')
		p('### Labels')
		for station in network:
			attrs = 'label={}'.format(dot_str(station.name))
			if station.id in route_stations:
				attrs += ', color={0}, fontcolor={0}, penwidth=2'.format(dot_str(route_color))
			p('{} [{}]', dot_str(node_name(station.id)), attrs)

		p('')
		p('### Edges')
		edges_done = set()
		for station in network:
			for edge in network.edges_from(station.id):
				k = frozenset([station.id, edge.dst]), edge.weight
				if k in edges_done: continue
				edges_done.add(k)
				attrs = 'label={}'.format(dot_str(edge.weight))
				if k[0] in route_edges:
					attrs += ', color={}, penwidth=3'.format(dot_str(route_color))
				p( '{} -- {} [{}]', dot_str(node_name(station.id)),
					dot_str(node_name(edge.dst)), attrs )
