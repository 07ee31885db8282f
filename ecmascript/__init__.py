import logging

from .numbers import inf, neginf, nan
from .runtime import undefined, null, absent, \
	JavaScriptException, JavaScriptTypeError, RejectedDefinition, \
	typeOf, isPrimitive, isCallable, call, \
	toPrimitive, toBoolean, toNumber, toInteger, toInt32, toUint32, \
	toUint16, toString, toObject, checkObjectCoercible, \
	sameValue, strictlyEqual, \
	PropertyDescriptor, createDataProperty, createAccessorProperty, \
	isDataDescriptor, isAccessorDescriptor, isGenericDescriptor, \
	fromPropertyDescriptor, toPropertyDescriptor, \
	JavaScriptObject, JavaScriptFunction, NativeFunction, \
	JavaScriptBoolean, JavaScriptNumber, JavaScriptString, JavaScriptDate, \
	get, defineOwnProperty
from .realm import Realm, RealmClosed

logging.getLogger(__name__).addHandler(logging.NullHandler())
