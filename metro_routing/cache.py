from . import utils as u


class RouteCache:
	'''Memo of previously computed paths, keyed by ordered (src, dst) station-name pair.
		Network is static, so entries are never invalidated, and only ever added for found paths.

		With key_mode=False, path search mode (time-optimized or hop-minimized)
			is not a part of the key, so queries in different modes for the same
			station pair return whichever path was cached first.
		This is a known defect, kept by default for parity with the reference behavior,
			and can be fixed by setting EngineConf.cache_key_with_mode.'''

	key_sep = '|'

	def __init__(self, key_mode=False):
		self.key_mode, self.set_idx = key_mode, dict()
		self.hits = self.misses = 0
		self.log = u.get_logger('metro.cache')

	def key(self, name_src, name_dst, time_optimized=True):
		key = [name_src, name_dst]
		if self.key_mode: key.append('time' if time_optimized else 'hops')
		return self.key_sep.join(key)

	def get(self, name_src, name_dst, time_optimized=True):
		'Return copy of cached path (list of station ids) or None.'
		key = self.key(name_src, name_dst, time_optimized)
		path = self.set_idx.get(key)
		if path is None:
			self.misses += 1
			return
		self.hits += 1
		self.log.debug('[{}] Cache hit (path length: {})', key, len(path))
		return list(path)

	def add(self, name_src, name_dst, time_optimized, path):
		assert path, [name_src, name_dst]
		key = self.key(name_src, name_dst, time_optimized)
		self.set_idx[key] = tuple(path)
		self.log.debug('[{}] Stored path (length: {})', key, len(path))

	def stat_hit_ratio(self):
		total = self.hits + self.misses
		return (self.hits / total) if total else 0

	def __contains__(self, key): return key in self.set_idx
	def __len__(self): return len(self.set_idx)
	def __iter__(self): return iter(self.set_idx.items())
