import re
from decimal import Decimal
from math import isinf, isnan

inf = float('inf')
neginf = float('-inf')
nan = float('nan')

# WhiteSpace and LineTerminator characters (ES5 7.2, 7.3)
whitespace = u"\t\n\v\f\r \u00a0\u1680\u180e\u2000-\u200a" \
	u"\u2028\u2029\u202f\u205f\u3000\ufeff"

wx = re.compile(u'^[%s]+|[%s]+$' % (whitespace, whitespace))

# StringNumericLiteral (ES5 9.3.1)
hx = re.compile(r'^0[xX]([0-9a-fA-F]+)$')
dx = re.compile(r"""^([+\-]?)(
	 Infinity
	|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+\-]?[0-9]+)?
)$""", re.VERBOSE)


def stringToNumber(s):
	s = wx.sub('', s)
	if not s:
		return 0.0
	m = hx.match(s)
	if m:
		try:
			return float(int(m.group(1), 16))
		except OverflowError:
			return inf
	m = dx.match(s)
	if not m:
		return nan
	sign, literal = m.groups()
	if literal == 'Infinity':
		value = inf
	else:
		value = float(literal)
	return -value if sign == '-' else value


def numberToString(m):
	"""ToString applied to the Number type (ES5 9.8.1)."""
	if isnan(m):
		return 'NaN'
	if m == 0:
		return '0'
	if m < 0:
		return '-' + numberToString(-m)
	if isinf(m):
		return 'Infinity'

	# repr() gives the shortest digit string that round trips, so s below
	# has as few digits as possible
	sign, digits, exponent = Decimal(repr(float(m))).normalize().as_tuple()
	s = ''.join(str(d) for d in digits)
	k = len(s)
	n = exponent + k

	if k <= n <= 21:
		return s + '0' * (n - k)
	if 0 < n <= 21:
		return s[:n] + '.' + s[n:]
	if -6 < n <= 0:
		return '0.' + '0' * -n + s
	e = n - 1
	e = ('+' if e >= 0 else '-') + str(abs(e))
	if k == 1:
		return s + 'e' + e
	return s[0] + '.' + s[1:] + 'e' + e
