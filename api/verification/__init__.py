"""
Phone verification (SMS OTP) and verified customers.
"""
