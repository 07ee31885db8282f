import logging
from datetime import datetime, timedelta, timezone
from math import isinf, isnan

from .runtime import null, typeOf, toObject, toString, toNumber, toInteger, \
	toUint32, JavaScriptException, JavaScriptTypeError, JavaScriptObject, \
	JavaScriptFunction, JavaScriptDate, NativeFunction, \
	JavaScriptNativePrototype, createDataProperty, isCallable, \
	primitiveValue, native, call
from .numbers import nan

logger = logging.getLogger(__name__)

epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)

# the Gregorian calendar, weekdays included, repeats every 400 years
cycle = 146097 * 86400000.0 # ms

def timeClip(t):
	"""A time value, or NaN when t is outside +/- 8.64e15 ms (ES5 15.9.1.14)."""
	if isnan(t) or isinf(t) or abs(t) > 8.64e15:
		return nan
	return toInteger(t)

def formatTime(t):
	# datetime stops at year 9999, so shift whole cycles into its range
	cycles = int(t // cycle)
	d = epoch + timedelta(milliseconds=t - cycles * cycle)
	return '%s %04d %s GMT+0000' % (d.strftime('%a %b %d'),
		d.year + 400 * cycles, d.strftime('%H:%M:%S'))


class RealmClosed(JavaScriptException):
	pass


## Native Prototypes

class JavaScriptObjectPrototype(JavaScriptNativePrototype):

	@native
	def toString(this, args, realm):
		if this is None:
			return '[object Undefined]'
		if this is null:
			return '[object Null]'
		return '[object %s]' % toObject(this, realm).name

	@native
	def valueOf(this, args, realm):
		return toObject(this, realm)

	@native(length=1)
	def hasOwnProperty(this, args, realm):
		key = toString(args[0] if len(args) else None)
		return toObject(this, realm).get_own_property(key) is not None

	@native(length=1)
	def isPrototypeOf(this, args, realm):
		if not len(args) or typeOf(args[0]) != 'Object':
			return False
		o = toObject(this, realm)
		seen = set()
		prototype = args[0].prototype
		while prototype and id(prototype) not in seen:
			if prototype is o:
				return True
			seen.add(id(prototype))
			prototype = prototype.prototype
		return False

	@native(length=1)
	def propertyIsEnumerable(this, args, realm):
		key = toString(args[0] if len(args) else None)
		desc = toObject(this, realm).get_own_property(key)
		return desc is not None and desc.enumerable

class JavaScriptFunctionPrototype(JavaScriptNativePrototype, JavaScriptFunction):

	def call(self, this, args):
		return None

	@native
	def toString(this, args, realm):
		if not isCallable(this):
			raise JavaScriptTypeError('Function.prototype.toString called '
				'on incompatible receiver')
		return 'function () { [native code] }'

	@native(length=1, name='call')
	def call_(this, args, realm):
		thisArg = args[0] if len(args) else None
		return call(this, thisArg, args[1:])

	@native(length=2)
	def apply(this, args, realm):
		thisArg = args[0] if len(args) else None
		argArray = args[1] if len(args) > 1 else None
		if argArray is None or argArray is null:
			return call(this, thisArg)
		if typeOf(argArray) != 'Object':
			raise JavaScriptTypeError('Function.prototype.apply: '
				'arguments list has wrong type')
		n = int(toUint32(argArray['length']))
		return call(this, thisArg, [argArray[str(i)] for i in range(n)])

class JavaScriptBooleanPrototype(JavaScriptNativePrototype):
	name = 'Boolean'
	value = False

	@native
	def toString(this, args, realm):
		return toString(primitiveValue(this, 'Boolean'))

	@native
	def valueOf(this, args, realm):
		return primitiveValue(this, 'Boolean')

class JavaScriptNumberPrototype(JavaScriptNativePrototype):
	name = 'Number'
	value = 0.0

	@native
	def toString(this, args, realm):
		return toString(primitiveValue(this, 'Number'))

	@native
	def valueOf(this, args, realm):
		return primitiveValue(this, 'Number')

class JavaScriptStringPrototype(JavaScriptNativePrototype):
	name = 'String'
	value = ''

	@native
	def toString(this, args, realm):
		return primitiveValue(this, 'String')

	@native
	def valueOf(this, args, realm):
		return primitiveValue(this, 'String')

class JavaScriptDatePrototype(JavaScriptNativePrototype):
	name = 'Date'
	value = nan

	@native
	def toString(this, args, realm):
		t = timeClip(primitiveValue(this, 'Date'))
		if isnan(t):
			return 'Invalid Date'
		return formatTime(t)

	@native
	def valueOf(this, args, realm):
		return primitiveValue(this, 'Date')

	@native
	def getTime(this, args, realm):
		return primitiveValue(this, 'Date')


## Realm

class Realm(object):
	"""One simulated environment: the intrinsic prototypes plus the registry
	of named values the host publishes into it.

	A realm lives until close() is called; afterwards every operation on it
	raises RealmClosed. It can also be used as a context manager."""

	def __init__(self):
		self.closed = False

		self.object_prototype = JavaScriptObjectPrototype(null)
		self.function_prototype = \
			JavaScriptFunctionPrototype(self.object_prototype)

		def prototype(attr, constructor):
			o = constructor(self.object_prototype)
			setattr(self, attr, o)

		prototype('boolean_prototype', JavaScriptBooleanPrototype)
		prototype('number_prototype', JavaScriptNumberPrototype)
		prototype('string_prototype', JavaScriptStringPrototype)
		prototype('date_prototype', JavaScriptDatePrototype)

		for o in (self.object_prototype, self.function_prototype,
				self.boolean_prototype, self.number_prototype,
				self.string_prototype, self.date_prototype):
			o.bind(self.function_prototype, self)

		self.global_object = JavaScriptObject(self.object_prototype)
		logger.debug('created realm %#x', id(self))

	def check(self):
		if self.closed:
			raise RealmClosed('realm is closed')

	def create_object(self, prototype=None):
		self.check()
		if prototype is None:
			prototype = self.object_prototype
		return JavaScriptObject(prototype)

	def create_function(self, fn, length=0, name=None):
		self.check()
		return NativeFunction(fn, length, name, self.function_prototype, self)

	def create_date(self, value=nan):
		self.check()
		return JavaScriptDate(self.date_prototype, timeClip(toNumber(value)))

	def to_object(self, value):
		self.check()
		return toObject(value, self)

	def register(self, name, value):
		self.check()
		self.global_object.define_own_property(name,
			createDataProperty(value, True, False, True), True)
		logger.debug('registered %r in realm %#x', name, id(self))
		return value

	def lookup(self, name):
		self.check()
		return self.global_object[name]

	def __contains__(self, name):
		self.check()
		return self.global_object.has_property(name)

	def close(self):
		if self.closed:
			return
		self.global_object.properties.clear()
		self.closed = True
		logger.debug('closed realm %#x', id(self))

	def __enter__(self):
		return self

	def __exit__(self, *exc_info):
		self.close()
