# stock_extractor/tests/samples.py
"""Pasted Screener.in page fragments shared by the tests."""

HEADER = """HDFC Bank Ltd
₹ 937
0.45%
Market Cap
₹ 14,41,456 Cr.
Current Price
₹ 937
High / Low
₹ 1,020 / 812
Stock P/E
20.3
Book Value
₹ 337
Dividend Yield
1.17 %
ROCE
7.51 %
ROE
14.3 %
Face Value
₹ 1.00
"""

PROFIT_AND_LOSS = """Profit & Loss
Mar 2023\tMar 2024\tTTM
Revenue\t170754\t283649\t307581
Financing Margin %\t-2%\t5%\t8%\t-
EPS in Rs\t79.05\t80.30\t90.53
"""

GROWTH = """Compounded Sales Growth
10 Years:\t19%
5 Years:\t21%
3 Years:\t28%
TTM:\t12%
Compounded Profit Growth
10 Years:\t20%
5 Years:\t18%
3 Years:\t21%
TTM:\t-4%
"""

SHAREHOLDING = """Shareholding Pattern
Mar 2025\tJun 2025
Promoters +\t25.59%\t25.52%
FIIs +\t48.12%\t47.95%
DIIs +\t18.20%\t18.66%
Public +\t8.09%\t7.87%
No. of Shareholders\t3700000\t3800000
"""

SIGNALS = """Upcoming result date: 18 January 2026
Board Meeting Intimation for Financial Results
Dividend record date 15 June
"""

FULL_PAGE = HEADER + PROFIT_AND_LOSS + GROWTH + SHAREHOLDING + SIGNALS

WITHOUT_SHAREHOLDING = HEADER + PROFIT_AND_LOSS + GROWTH + SIGNALS
