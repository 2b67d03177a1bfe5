import itertools as it, operator as op, functools as ft
import os, logging, math
import contextlib, tempfile, stat

import attr


class LogMessage:
	def __init__(self, fmt, a, k): self.fmt, self.a, self.k = fmt, a, k
	def __str__(self): return self.fmt.format(*self.a, **self.k) if self.a or self.k else self.fmt

class LogStyleAdapter(logging.LoggerAdapter):
	def __init__(self, logger, extra=None):
		super(LogStyleAdapter, self).__init__(logger, extra or {})
	def log(self, level, msg, *args, **kws):
		if not self.isEnabledFor(level): return
		log_kws = {} if 'exc_info' not in kws else dict(exc_info=kws.pop('exc_info'))
		msg, kws = self.process(msg, kws)
		self.logger._log(level, LogMessage(msg, args, kws), (), log_kws)

get_logger = lambda name: LogStyleAdapter(logging.getLogger(name))


def attr_struct(cls=None, vals_to_attrs=False, **kws):
	'''attrs class decorator with slots, where fields can be declared via
		"keys" string attribute, or from plain class values with vals_to_attrs=True.'''
	if not cls: return ft.partial(attr_struct, vals_to_attrs=vals_to_attrs, **kws)
	try:
		keys = cls.keys
		del cls.keys
	except AttributeError: keys = list()
	else:
		if isinstance(keys, str): keys = keys.split()
		for k in keys: setattr(cls, k, attr.ib())
	if vals_to_attrs:
		for k, v in list(vars(cls).items()):
			if k.startswith('_') or k in keys or callable(v): continue
			setattr(cls, k, attr.ib(v))
	kws.setdefault('hash', '__hash__' not in vars(cls) and None)
	kws.setdefault('slots', True)
	return attr.s(cls, **kws)

def attr_init(factory_or_default=attr.NOTHING, **attr_kws):
	if callable(factory_or_default): factory_or_default = attr.Factory(factory_or_default)
	return attr.ib(default=factory_or_default, **attr_kws)


def same_type_and_id(v1, v2):
	return type(v1) is type(v2) and v1.id == v2.id

inf = float('inf')

def round_half_up(value, step=1):
	'Round value to nearest multiple of step, with halves always going up.'
	return math.floor(value / step + 0.5) * step


@contextlib.contextmanager
def safe_replacement(path, mode=None):
	'Text file to write into, which only replaces one at path after successful write.'
	path = str(path)
	if mode is None:
		try: mode = stat.S_IMODE(os.lstat(path).st_mode)
		except OSError: pass
	with tempfile.NamedTemporaryFile( 'w', delete=False,
			dir=os.path.dirname(path) or '.', prefix=os.path.basename(path)+'.' ) as tmp:
		try:
			if mode is not None: os.fchmod(tmp.fileno(), mode)
			yield tmp
			if not tmp.closed: tmp.flush()
			os.rename(tmp.name, path)
		finally:
			try: os.unlink(tmp.name)
			except OSError: pass
